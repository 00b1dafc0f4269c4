"""APK Hub -- catalog and serve build artifacts grouped by project, app and build."""

__version__ = "0.1.0"
