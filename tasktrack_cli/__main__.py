from tasktrack_cli.cli import main

main()
