"""
Assist Module
=============

Ticket assistant: category/priority suggestions for new tickets and
remediation ideas for agents. Uses a language model when configured,
keyword heuristics otherwise.
"""
