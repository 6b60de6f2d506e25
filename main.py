"""Entry point for pickify: drive Spotify from a dmenu-style picker."""

from pickify.cli import run

if __name__ == "__main__":
    run()
