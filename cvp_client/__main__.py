"""
Main entry point for the cvp_client package.

Allows running the client as: python -m cvp_client
"""

from cvp_client.cli import main

if __name__ == "__main__":
    main()
