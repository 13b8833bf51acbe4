"""Terminal frame buffer, drawing helpers, key decoding, simple prompts, growable arrays and a streaming JSON tokenizer."""

__version__ = "0.1.0"