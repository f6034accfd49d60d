# mkvtranscode

mkvtranscode watches a directory tree for Matroska (`.mkv`) videos and
converts each one to MP4 with `ffmpeg`. If the tree also holds an `.srt`
file with the same base name, the subtitles go into the MP4 as a
`mov_text` track tagged as English.

Each pass over the directory first checks the Linux device files for a GPU:

- `/dev/dri/card*` or `/dev/dri/renderD*` selects VAAPI (`h264_vaapi`, device `/dev/dri/renderD128`)
- `/dev/nvidia*` selects NVENC (`h264_nvenc`)
- if neither is found, or `FORCE_CPU` is set, encoding runs in software with `libx264`

Audio is encoded as AAC at 128 kbit/s. The video uses the H.264 main
profile at level 4.0, and `+faststart` is set.

## Requirements

- Python 3.10 or newer
- `ffmpeg` on `PATH`

## Installation

```
pip install .
```

## Usage

```
mkvtranscode
```

The command has no options. It reads its settings from the environment:

| Variable    | Meaning                                                                      | Default                        |
|-------------|------------------------------------------------------------------------------|--------------------------------|
| `WATCH_DIR` | Directory to watch, including its subdirectories                             | `/mnt/smb/Test-transcoding`    |
| `IS_SMB`    | `true` (in any case) polls every 30 seconds instead of using filesystem events | `false`                      |
| `THREADS`   | Number of files converted in parallel (a non-negative integer)               | half the CPU count, at least 1 |
| `FORCE_CPU` | Any value skips GPU detection                                                | unset                          |

Example:

```
WATCH_DIR=/srv/videos IS_SMB=true THREADS=2 mkvtranscode
```

In event mode, each file created or modified under `WATCH_DIR` starts a new
pass over the whole directory in the background. If `WATCH_DIR` does not
exist, the command stops with `FileNotFoundError`. Ctrl-C exits with
status 130.

## What a pass does

For each `<name>.mkv` that the ledger does not list:

1. The file is copied to `/tmp/video_convert_work`.
2. If `<name>.mp4` already exists next to it, the name is added to the
   ledger and nothing else happens.
3. Otherwise any matching subtitle file is copied to the same working
   directory, and `ffmpeg` writes `<name>.mp4` next to the original.
4. On success the result is also copied to `<name>.converted.mp4`, and
   the name is added to the ledger.

The ledger is a plain text file at `/var/tmp/converted_ledger.txt`, with
one base name per line.

## Library use

```python
from mkvtranscode.config import load_config
from mkvtranscode.processing import build_ffmpeg_command, collect_files, process_directory

cfg = load_config()                      # or load_config({"WATCH_DIR": "/srv/videos"})
videos, subtitles = collect_files(cfg.watch_dir)   # dicts: base name -> Path
print(build_ffmpeg_command("cpu", "in.mkv", "out.mp4", "in.srt"))
process_directory(cfg.watch_dir, cfg.threads,
                  ledger_path="/tmp/ledger.txt", temp_dir="/tmp/work")
```

- `mkvtranscode.config`: `AppConfig` and `load_config(environ=None)`.
- `mkvtranscode.gpu`: `detect_gpu_from_devices(dri_dir="/dev/dri", dev_dir="/dev")`
  checks device files. `detect_gpu_type()` runs `ffmpeg` itself to probe for
  CUDA and then VAAPI. Both return `"nvenc"`, `"vaapi"` or `"cpu"`.
- `mkvtranscode.ledger`: `load_ledger`, `append_to_ledger`,
  `remove_from_ledger` and `save_ledger`. Each takes an optional `path`.
- `mkvtranscode.watcher`: `start_watch(watch_dir, threads=None)` and
  `start_watch_with_fallback(watch_dir, threads=None, interval=30,
  max_iterations=None)`. The second returns the number of passes once
  `max_iterations` is reached.
- `mkvtranscode.app`: `start_transcoding_app(environ=None)` and `main()`.

## Limitations

- When `ffmpeg` fails, the message points to `<name>.log`, but no log file
  is written. `ffmpeg` output goes straight to the console.
- The command always uses the default ledger and working directory. Only
  the library functions can change them.
- Files whose conversion failed are retried on every pass.