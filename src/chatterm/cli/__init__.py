"""Terminal front end: event loop, widgets and the chatterm command."""
