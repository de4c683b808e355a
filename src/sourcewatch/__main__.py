from sourcewatch.cli import main

main()
