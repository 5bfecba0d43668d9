"""
server – HTTP front of the legal-document assistant.

Entry point:  server.main:app  (FastAPI ASGI application)

Modules:
    config      Settings loaded once from the environment / .env
    ai          Gemini generateContent client
    main        Application factory and routes
"""
