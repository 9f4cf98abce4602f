"""
File I/O boundary for delimited documents.

Reads and writes complete documents as UTF-8 text and hands them to the codec.
"""
