# Formats a duration in seconds as MM:SS, or HH:MM:SS once it reaches an hour. Negative values clamp to zero.
def format_time(seconds):
    seconds = max(0, int(round(seconds)))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    if h:
        return f"{h:d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"
