from git_ignore.app import main

main()
