from skel.cli import main

main()
