"""Money gateway: Razorpay payments and Gemini text generation behind one API."""

__version__ = "0.1.0"
