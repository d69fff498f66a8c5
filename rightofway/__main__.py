from rightofway.cli import main

main()
