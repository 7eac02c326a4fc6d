"""
bnfparse: BNF grammar parser and HTTP parsing service
"""

__version__ = "0.2.0"
__author__ = "bnfparse Development Team"
