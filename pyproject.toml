[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mkvtranscode"
version = "0.1.0"
description = "Watch a folder and transcode MKV videos with subtitles to MP4 using ffmpeg, with hardware acceleration when available"
requires-python = ">=3.10"
keywords = ["ffmpeg", "transcode", "mkv", "mp4", "subtitles", "watcher", "vaapi", "nvenc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Conversion",
]
dependencies = [
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mkvtranscode = "mkvtranscode.app:main"

[tool.hatch.build.targets.wheel]
packages = ["mkvtranscode"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
