from termmon.cli import main

main()
