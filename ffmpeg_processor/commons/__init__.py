"""Commons package - settings and telemetry shared by both front-ends."""
