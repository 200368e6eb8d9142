"""HTTP content negotiation and body transcoding middleware.

- Formatter: from content_negotiation.middleware import Formatter
- Versioner: from content_negotiation.middleware import Versioner
- FastAPI: from content_negotiation.fastapi import NegotiationApp
"""

__version__ = "0.1.0"
