from license_cli.cli import main

main()
