"""Shared helpers for logging, configuration and naming"""
