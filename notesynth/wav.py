from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import soundfile as sf  # type: ignore[import]

from .audio import PcmArray, PcmNumbers, ensure_pcm_contract
from .errors import InvalidConfigError, WavWriteError

_LOGGER = logging.getLogger("notesynth.wav")

HEADER_SIZE = 44
CHANNELS = 1
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8
PCM_FORMAT_TAG = 1
FMT_CHUNK_SIZE = 16

# RIFF master chunk, fmt chunk, data chunk header; all little-endian.
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


@dataclass(frozen=True, slots=True)
class WavHeader:
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int

    @property
    def sample_count(self) -> int:
        return self.data_size // self.block_align


def encode_wav(samples: PcmNumbers, sample_rate: int) -> bytes:
    """Serialize mono 16-bit PCM samples into a 44-byte-header WAV container."""
    pcm = ensure_pcm_contract(samples)
    block_align = CHANNELS * BYTES_PER_SAMPLE
    data_size = pcm.size * BYTES_PER_SAMPLE
    header = _HEADER.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        FMT_CHUNK_SIZE,
        PCM_FORMAT_TAG,
        CHANNELS,
        sample_rate,
        sample_rate * block_align,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )
    return header + pcm.astype("<i2").tobytes()


def write_wav(path: str | Path, samples: PcmNumbers, sample_rate: int) -> Path:
    """Encode samples and write them to ``path``, creating parent directories.

    The file is written next to the target and renamed into place, so a
    failed write leaves no partial file behind.
    """
    target = Path(path)
    payload = encode_wav(samples, sample_rate)
    partial = target.with_name(f".{target.name}.partial")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        partial.write_bytes(payload)
        partial.replace(target)
    except OSError as exc:
        if partial.exists():
            partial.unlink()
        raise WavWriteError(target, exc.strerror or str(exc)) from exc
    _LOGGER.debug("Wrote %d bytes to %s", len(payload), target)
    return target


encode_and_write = write_wav


def parse_wav_header(data: bytes) -> WavHeader:
    """Decode the canonical 44-byte header written by ``encode_wav``."""
    if len(data) < HEADER_SIZE:
        raise InvalidConfigError(f"WAV data too short: {len(data)} bytes")
    (
        riff,
        _riff_size,
        wave,
        fmt,
        fmt_size,
        format_tag,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        data_tag,
        data_size,
    ) = _HEADER.unpack_from(data)
    if (riff, wave, fmt, data_tag) != (b"RIFF", b"WAVE", b"fmt ", b"data"):
        raise InvalidConfigError("Not a canonical RIFF/WAVE container")
    if fmt_size != FMT_CHUNK_SIZE or format_tag != PCM_FORMAT_TAG:
        raise InvalidConfigError(f"Unsupported WAV format tag {format_tag}")
    if channels != CHANNELS or bits_per_sample != BITS_PER_SAMPLE:
        raise InvalidConfigError(
            f"Expected mono 16-bit PCM, got {channels} channel(s) at {bits_per_sample} bits"
        )
    return WavHeader(
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        data_size=data_size,
    )


def read_wav(path: str | Path) -> tuple[PcmArray, int]:
    """Load a mono WAV file as int16 samples plus its sample rate."""
    data, sample_rate = sf.read(str(path), dtype="int16", always_2d=False)  # type: ignore[reportUnknownMemberType]
    samples = np.asarray(data, dtype=np.int16)
    if samples.ndim != 1:
        raise InvalidConfigError(f"Expected a mono file, got shape {samples.shape}")
    return samples, int(sample_rate)
