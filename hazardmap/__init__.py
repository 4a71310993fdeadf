"""hazardmap: report, claim and complete environmental hazards on a map."""

__version__ = "0.1.0"
