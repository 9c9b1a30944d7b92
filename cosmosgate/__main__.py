"""
Entry point for running cosmosgate as a module: python -m cosmosgate
"""

from cosmosgate.cli.commands import app

if __name__ == "__main__":
    app()
