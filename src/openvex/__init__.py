"""OpenVEX documents and canonical document identification.

This package models Vulnerability Exploitability eXchange documents as
described by https://github.com/openvex/spec and computes their canonical
identifiers, compatible with the ones produced by go-vex.
"""

__version__ = "1.0.0"
