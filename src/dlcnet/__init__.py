"""dlcnet: DLC requirement graph and force-directed layout engine."""

__version__ = "0.1.0"
