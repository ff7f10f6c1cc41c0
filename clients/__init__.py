"""Apigee management API clients"""
