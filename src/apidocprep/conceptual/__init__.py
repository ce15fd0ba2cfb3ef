"""Conceptual content: token files, code snippets, images and topics.

This module provides the classes used to copy conceptual content into the working
folder and to generate the configuration files used to build conceptual topics.
"""
