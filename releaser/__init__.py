"""Release train automation: version model and task pipeline."""

__version__ = "0.1.0"
