from .interact import main

main()
