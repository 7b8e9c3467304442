"""Transcode worker: push endpoint, job controller, scratch space and ffmpeg adapter."""
