"""
Entry point script for the loz application.
This allows running the app directly from the project root.
"""
from loz.main import main

if __name__ == "__main__":
    main()
