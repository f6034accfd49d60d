"""Detection of the hardware encoder available to ffmpeg."""

from __future__ import annotations

import os
import subprocess

NVENC = "nvenc"
VAAPI = "vaapi"
CPU = "cpu"

_NULL_RENDER = ["-f", "lavfi", "-i", "nullsrc", "-frames:v", "1", "-f", "null", "-"]


def _force_cpu() -> bool:
    if "FORCE_CPU" in os.environ:
        print("🔧 FORCE_CPU set — skipping GPU detection")
        return True
    return False


def _entry_names(directory: str) -> list[str] | None:
    try:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries]
    except OSError:
        return None


def detect_gpu_from_devices(dri_dir: str = "/dev/dri", dev_dir: str = "/dev") -> str:
    """Guess the encoder from device files.

    Returns "vaapi" for an Intel/AMD render node, "nvenc" for an NVIDIA
    device and "cpu" otherwise or when FORCE_CPU is set.
    """
    if _force_cpu():
        return CPU

    names = _entry_names(dri_dir)
    if names is None:
        print(f"❌ Cannot access {dri_dir}")
    else:
        for name in names:
            if name.startswith(("card", "renderD")):
                print(f"🔌 VAAPI-compatible GPU detected: {os.path.join(dri_dir, name)!r}")
                return VAAPI

    names = _entry_names(dev_dir)
    if names is None:
        print(f"❌ Cannot access {dev_dir}")
    else:
        for name in names:
            if name.startswith("nvidia"):
                print(f"⚡ NVIDIA GPU device detected: {os.path.join(dev_dir, name)!r}")
                return NVENC

    print("🧱 No GPU detected via device files, defaulting to CPU")
    return CPU


def _ffmpeg_stderr(args: list[str]) -> str | None:
    try:
        result = subprocess.run(["ffmpeg", *args], capture_output=True)
    except OSError:
        return None
    return result.stderr.decode("utf-8", errors="replace")


def detect_gpu_type() -> str:
    """Probe ffmpeg for CUDA, then VAAPI, falling back to "cpu"."""
    if _force_cpu():
        return CPU

    stderr = _ffmpeg_stderr(["-init_hw_device", "cuda=cu:0", *_NULL_RENDER])
    if stderr is not None and "cuda device" in stderr.lower():
        print("⚡ NVIDIA GPU (CUDA) detected")
        return NVENC

    stderr = _ffmpeg_stderr(["-hwaccel", "vaapi", *_NULL_RENDER])
    if stderr is not None and ("/dev/dri/renderD" in stderr or "vaapi" in stderr.lower()):
        print("🔌 VAAPI GPU detected")
        return VAAPI

    print("🧱 No GPU detected, defaulting to CPU")
    return CPU