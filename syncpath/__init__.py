"""syncpath: rsync + ssh with smart pathing"""

__version__ = "0.1.0"
