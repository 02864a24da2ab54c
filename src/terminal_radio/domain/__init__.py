"""Domain layer: radio stations and playback process management."""
