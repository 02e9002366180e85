"""podson - list the pods running on a set of Kubernetes nodes."""

__version__ = "0.1.0"
