"""ytfetch: resolve a destination path and fetch media into it with yt-dlp."""

__app_name__ = "ytfetch"
__version__ = "0.1.0"
