"""Client-side core of a small instant-messaging application: data, protocol and widget state."""

__version__ = "0.1.0"