# Message type constants (stringly-typed protocol; canonical list lives here)

T_HELLO = "hello"

# relay -> viewers
T_NEW_SUBSCRIBER = "new_subscriber"

# overlay -> viewers (draw commands)
T_HAND = "hand"
T_POSE = "pose"
T_LINE_TEXT = "line_text"
T_STRIKE = "strike"
T_CLEAR = "clear"
