"""Core infrastructure shared by the response helpers.

This package provides the foundational pieces used across ``respond``:

- **config**: Settings for encoders and logging with environment support
- **constants**: Charset, header name and MIME types written by the helpers
- **exceptions**: Structured exception hierarchy with error codes
- **logging**: Opt-in Loguru logging for applications embedding the library
- **types**: Type aliases for better code clarity
"""
