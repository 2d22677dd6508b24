"""
Service layer.

``FibService`` implements the memoized Fibonacci operations purely in
terms of the ``MemoStore`` contract, so the API handlers never touch
storage directly.
"""
