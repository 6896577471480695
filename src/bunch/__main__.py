from bunch.cli import main

main()
