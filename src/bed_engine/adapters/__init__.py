"""Front ends that feed input lines to the command engine."""
