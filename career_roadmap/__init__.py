"""Career roadmap pipeline: resume analysis, roadmap generation and milestone categorization."""

__version__ = "0.1.0"
