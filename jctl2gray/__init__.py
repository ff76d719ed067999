"""Ship systemd journal records to Graylog as GELF messages over UDP."""

__version__ = "0.2.3"