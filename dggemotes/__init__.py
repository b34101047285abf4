"""
dgg-emotes: fetch destiny.gg emote metadata and download the images.
"""

__version__ = "0.1.0"
