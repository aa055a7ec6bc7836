"""Wildlife chat backend routing messages to scripted or generated replies."""

__version__ = "0.1.0"
