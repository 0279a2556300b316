from tureng.cli import main

main()
