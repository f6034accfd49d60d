"""Watch a folder and transcode MKV videos (with SRT subtitles) to MP4 with ffmpeg."""

__version__ = "0.1.0"