"""Home Gateway.

Conversational control of SmartThings devices: utterances are gated by an
intent oracle, parsed into device commands, executed against the
SmartThings REST API and confirmed through a completion oracle.
"""

__version__ = "0.1.0"
