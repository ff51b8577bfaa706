"""CLI module for branchstore."""
