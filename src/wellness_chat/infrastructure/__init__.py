"""
infrastructure - Concrete implementations of domain ports.

Contains all vendor-specific code: aiosqlite repositories, regex
extractors, the keyword intent router and configuration loading.
Depends on domain/ only (implements ports). Never imported by application/.
"""
