from vendbus.main import main

main()
