"""Build, sign, send, decode and render Flow blockchain transactions."""

__version__ = "0.1.0"