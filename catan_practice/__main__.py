from catan_practice.ui.console import main

if __name__ == "__main__":
    main()
