from trello_bulk.cli import main

main()
