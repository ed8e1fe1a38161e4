from flexbar.cli import main

main()
