from shprestore.cli import main

main()
