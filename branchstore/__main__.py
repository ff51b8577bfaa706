"""
Entry point for running branchstore as a module: python -m branchstore
"""

from branchstore.cli.commands import app

if __name__ == "__main__":
    app()
