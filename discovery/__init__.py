"""Product discovery and registry export"""
