"""Pipeline stages: watermark, remote source, filter, report, notifier, run."""
