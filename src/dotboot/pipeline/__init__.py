"""Bootstrap pipeline."""

from dotboot.pipeline.executor import BootstrapPipeline, Stage

__all__ = ["BootstrapPipeline", "Stage"]
