from pdfrankenstein.app import main

main()
