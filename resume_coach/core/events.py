CONNECTED = "connected"
TRACE = "trace"
PROGRESS = "progress"
CHUNK = "chunk"
RESULT = "result"
ERROR = "error"
DONE = "done"
