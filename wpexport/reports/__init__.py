"""Batched PDF export of work package lists."""
