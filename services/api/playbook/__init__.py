"""Playbook API: persistence service for recorded sports plays."""
