from json_recover.cli import main

main()
