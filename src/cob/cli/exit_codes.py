# mirror <sysexits.h> for internal failures
EXIT_OK = 0  # No degression
EXIT_DEGRESSION = 1  # A benchmark got worse than the threshold allows
EXIT_DATAERR = 65  # Harness output could not be read
EXIT_NOINPUT = 66  # Not a repository, or HEAD~1 does not exist
EXIT_SOFTWARE = 70  # Benchmark harness failed
EXIT_IOERR = 74  # Working-tree reset failed or tree is dirty
EXIT_CONFIG = 78  # Invalid [tool.cob] configuration
