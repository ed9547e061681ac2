"""tscompile - run the TypeScript command-line compiler from Python."""

__version__ = "0.1.0"
