"""Drive Spotify from a dmenu-style picker."""
