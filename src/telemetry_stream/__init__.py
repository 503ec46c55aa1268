"""Line-delimited JSON hardware telemetry between an agent and a collector."""

__version__ = "0.1.0"
