"""
Entry point for running the package as a module.

Usage:
    $ python -m day_planner show today
    $ python -m day_planner --help
"""

from .main import app

if __name__ == "__main__":
    app()
