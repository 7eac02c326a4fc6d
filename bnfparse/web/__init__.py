"""bnfparse web service: HTTP front end for the grammar parser."""
