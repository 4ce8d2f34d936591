"""RFID tap attendance package.

Organized by feature modules (identifiers, users, logs, taps, realtime) with a
thin Flask controller layer over service/repository layers.
"""
