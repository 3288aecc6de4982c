# main.py
from chainview.cli.cli import main

if __name__ == "__main__":
    main()
