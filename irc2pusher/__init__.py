"""irc2pusher - republish IRC channel messages as Pusher events."""

__version__ = "0.1.0"
