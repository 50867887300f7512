"""
Entropy sources for the random generators.

Every generator in this package consumes uniformly distributed 32-bit
words. A source turns raw secure bytes into those words:

1. SystemEntropySource - the operating system CSPRNG (os.urandom)
2. NoiseEntropySource - webcam shot noise and microphone thermal noise,
   whitened with SHA-256

Word Limits:
------------
A single request may return at most MAX_WORDS_PER_CALL words (65536 bytes),
the same per-call quota a browser secure random source enforces. Larger
requests fail with EntropySourceError instead of being split, so callers
see the limit rather than a silently slower draw.

Byte Order:
-----------
Raw bytes are decoded as little-endian unsigned 32-bit integers. Any fixed
order works for uniform bytes; little-endian keeps the decoding identical
across platforms.
"""

import hashlib
import os
import struct
import time
from typing import Optional

import numpy as np

from .errors import EntropySourceError

# Hardware interfaces are optional
# These may not be available in all environments (e.g., CI/CD, headless servers)
try:
    import cv2
    CV2_AVAILABLE = True
except ImportError:
    CV2_AVAILABLE = False

try:
    import pyaudio
    PYAUDIO_AVAILABLE = True
except ImportError:
    PYAUDIO_AVAILABLE = False


WORD_SIZE = 4                       # bytes per uint32 word
MAX_BYTES_PER_CALL = 65536
MAX_WORDS_PER_CALL = MAX_BYTES_PER_CALL // WORD_SIZE
WORD_DTYPE = np.dtype('<u4')

SOURCE_KINDS = ('system', 'noise')


def words_from_bytes(data: bytes) -> np.ndarray:
    """
    Decode raw bytes into a read-only array of uint32 words.

    Args:
        data: Byte string whose length is a multiple of WORD_SIZE.

    Returns:
        numpy array with len(data) // 4 little-endian uint32 values.
    """
    if len(data) % WORD_SIZE:
        raise ValueError(
            f"Byte count {len(data)} is not a multiple of {WORD_SIZE}"
        )
    return np.frombuffer(data, dtype=WORD_DTYPE)


def check_word_count(count: int) -> None:
    """Reject negative counts and counts above the per-call limit."""
    if count < 0:
        raise ValueError(f"Word count must be non-negative, got {count}")
    if count > MAX_WORDS_PER_CALL:
        raise EntropySourceError(
            f"Requested {count} words, but a single call may return "
            f"at most {MAX_WORDS_PER_CALL}"
        )


class EntropySource:
    """
    Base class for secure word sources.

    Subclasses provide read_bytes(); read_words() decodes and enforces the
    per-call limit. Sources are context managers so hardware-backed ones can
    release their devices.
    """

    name = 'base'

    def read_bytes(self, num_bytes: int) -> bytes:
        raise NotImplementedError

    def read_words(self, count: int = 1) -> np.ndarray:
        """
        Return `count` independent uniform uint32 words.

        Raises:
            ValueError: count is negative.
            EntropySourceError: count exceeds MAX_WORDS_PER_CALL or the
                underlying source failed.
        """
        check_word_count(count)
        return words_from_bytes(self.read_bytes(count * WORD_SIZE))

    def close(self) -> None:
        """Release any resources held by the source."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class SystemEntropySource(EntropySource):
    """
    Entropy from the operating system CSPRNG.

    os.urandom() typically sources from:
    - Linux: getrandom() / /dev/urandom (kernel entropy pool)
    - Windows: BCryptGenRandom
    - macOS: getentropy()
    """

    name = 'system'

    def read_bytes(self, num_bytes: int) -> bytes:
        try:
            return os.urandom(num_bytes)
        except (NotImplementedError, OSError) as e:
            raise EntropySourceError(f"OS random source unavailable: {e}") from e


class NoiseEntropySource(EntropySource):
    """
    Entropy harvested from physical noise.

    Inputs:
    1. Webcam sensor (shot noise from photon arrival statistics)
    2. Microphone (thermal Johnson-Nyquist noise of the preamp)

    Each block mixes a fresh frame, a fresh audio buffer and a nanosecond
    timestamp, then whitens the mix with SHA-256 into 32 output bytes.
    """

    name = 'noise'

    # Audio capture parameters
    AUDIO_SAMPLE_RATE = 44100  # Hz
    AUDIO_CHUNK_SIZE = 1024    # samples per buffer

    # Video capture parameters
    # Low resolution is fine since we want noise, not image quality
    VIDEO_WIDTH = 320
    VIDEO_HEIGHT = 240

    # SHA-256 digest size
    BLOCK_SIZE = 32

    def __init__(self, camera_index: int = 0):
        self._video_capture: Optional[object] = None
        self._audio_stream: Optional[object] = None
        self._pyaudio_instance: Optional[object] = None

        self._webcam_available = False
        self._mic_available = False

        self._init_webcam(camera_index)
        self._init_microphone()

    @property
    def available(self) -> bool:
        """True when at least one hardware input is open."""
        return self._webcam_available or self._mic_available

    def _init_webcam(self, camera_index: int) -> None:
        if not CV2_AVAILABLE:
            print("Warning: OpenCV not available. Webcam entropy disabled.")
            return

        try:
            self._video_capture = cv2.VideoCapture(camera_index)
            if self._video_capture.isOpened():
                self._video_capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.VIDEO_WIDTH)
                self._video_capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.VIDEO_HEIGHT)
                # Auto-exposure flattens the relative shot noise
                self._video_capture.set(cv2.CAP_PROP_AUTO_EXPOSURE, 0.25)
                self._webcam_available = True
            else:
                print("Warning: Could not open webcam. Webcam entropy disabled.")
        except cv2.error as e:
            print(f"Warning: Webcam initialization failed: {e}")

    def _init_microphone(self) -> None:
        if not PYAUDIO_AVAILABLE:
            print("Warning: PyAudio not available. Microphone entropy disabled.")
            return

        try:
            self._pyaudio_instance = pyaudio.PyAudio()
            self._audio_stream = self._pyaudio_instance.open(
                format=pyaudio.paInt16,
                channels=1,
                rate=self.AUDIO_SAMPLE_RATE,
                input=True,
                frames_per_buffer=self.AUDIO_CHUNK_SIZE
            )
            self._mic_available = True
        except OSError as e:
            print(f"Warning: Microphone initialization failed: {e}")
            self._cleanup_audio()

    def _cleanup_audio(self) -> None:
        if self._audio_stream is not None:
            try:
                self._audio_stream.stop_stream()
                self._audio_stream.close()
            except OSError:
                pass
            self._audio_stream = None
        if self._pyaudio_instance is not None:
            self._pyaudio_instance.terminate()
            self._pyaudio_instance = None

    def harvest_webcam_entropy(self) -> bytes:
        """
        Capture one frame and return its raw pixel bytes.

        The least significant bits of every channel are dominated by shot,
        read and dark-current noise.

        Returns:
            Raw frame bytes, or empty bytes if capture fails.
        """
        if not self._webcam_available or self._video_capture is None:
            return b''

        ret, frame = self._video_capture.read()
        if ret and frame is not None:
            return frame.tobytes()
        return b''

    def harvest_microphone_entropy(self) -> bytes:
        """
        Capture one audio buffer (2 KB at 16-bit mono).

        Returns:
            Raw audio bytes, or empty bytes if capture fails.
        """
        if not self._mic_available or self._audio_stream is None:
            return b''

        try:
            # Overflow is expected under load and must not abort harvesting
            return self._audio_stream.read(
                self.AUDIO_CHUNK_SIZE,
                exception_on_overflow=False
            )
        except OSError as e:
            print(f"Warning: Microphone capture failed: {e}")
        return b''

    @staticmethod
    def get_timestamp_entropy() -> bytes:
        """Nanosecond timestamp; adds uniqueness, not primary entropy."""
        return struct.pack('<Q', time.time_ns())

    @staticmethod
    def mix_entropy(*sources: bytes) -> bytes:
        return b''.join(sources)

    @staticmethod
    def whiten(raw_entropy: bytes) -> bytes:
        """
        Condition raw noise with SHA-256.

        At most as much entropy comes out as went in; the hash removes bias
        and correlation between adjacent samples.
        """
        return hashlib.sha256(raw_entropy).digest()

    def read_bytes(self, num_bytes: int) -> bytes:
        if not self.available:
            raise EntropySourceError(
                "No hardware entropy inputs available! "
                "Need at least webcam or microphone access."
            )

        result = bytearray()
        while len(result) < num_bytes:
            webcam_entropy = self.harvest_webcam_entropy()
            mic_entropy = self.harvest_microphone_entropy()
            # A timestamp alone is predictable
            if not webcam_entropy and not mic_entropy:
                raise EntropySourceError(
                    "Webcam and microphone captures both failed; "
                    "refusing to whiten the timestamp alone."
                )
            mixed = self.mix_entropy(
                webcam_entropy,
                mic_entropy,
                self.get_timestamp_entropy(),
            )
            result.extend(self.whiten(mixed))

        return bytes(result[:num_bytes])

    def close(self) -> None:
        if self._video_capture is not None:
            self._video_capture.release()
            self._video_capture = None
        self._webcam_available = False

        self._cleanup_audio()
        self._mic_available = False


def create_entropy_source(kind: str = 'system') -> EntropySource:
    """
    Factory for entropy sources.

    Args:
        kind: 'system' for the OS CSPRNG, 'noise' for hardware noise.

    Returns:
        An open EntropySource. A 'noise' request with no usable hardware
        falls back to the system source.
    """
    if kind == 'system':
        return SystemEntropySource()
    if kind == 'noise':
        source = NoiseEntropySource()
        if not source.available:
            source.close()
            print("Using fallback entropy (OS random source).")
            return SystemEntropySource()
        return source
    raise ValueError(
        f"Unknown entropy source {kind!r}; expected one of {', '.join(SOURCE_KINDS)}"
    )
