from rclonekit.runner.abc import OutputSink, ProcessRunner
from rclonekit.runner.real import RealProcessRunner

__all__ = ["OutputSink", "ProcessRunner", "RealProcessRunner"]
