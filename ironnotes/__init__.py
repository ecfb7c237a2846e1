"""IronNotes: shorthand workout logging with PR tracking and a rest timer."""
__version__ = "0.1.0"
