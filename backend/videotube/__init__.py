"""videotube - video sharing backend: sessions, reactions, subscriptions and channel stats"""
__version__ = "0.1.0"
