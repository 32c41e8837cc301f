"""Real-time lunge repetition counter driven by pose landmarks."""

__version__ = "0.1.0"
