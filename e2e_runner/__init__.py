"""Scheduled end-to-end test runner with deduplicated failure alerts."""
