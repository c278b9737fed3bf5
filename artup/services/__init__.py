"""
Services for artup.

- upload/: the upload pipeline
- buildinfo/: build info storage and build properties
- repository/: built-in repository clients
"""
