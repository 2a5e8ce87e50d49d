"""Engine, file processing, preprocessor and logging for P69."""
