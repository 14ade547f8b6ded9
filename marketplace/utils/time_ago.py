from django.utils import timezone


def format_time_ago(created_at, now=None):
    """
    "Just now" / "5 min ago" / "3 hours ago" / "2 days ago", falling back to
    the local date once a post is a week old.
    """
    now = now or timezone.now()
    diff_seconds = (now - created_at).total_seconds()

    diff_mins = int(diff_seconds // 60)
    diff_hours = int(diff_seconds // 3600)
    diff_days = int(diff_seconds // 86400)

    if diff_mins < 1:
        return 'Just now'
    if diff_mins < 60:
        return f'{diff_mins} min ago'
    if diff_hours < 24:
        return f"{diff_hours} hour{'s' if diff_hours > 1 else ''} ago"
    if diff_days < 7:
        return f"{diff_days} day{'s' if diff_days > 1 else ''} ago"

    if timezone.is_aware(created_at):
        created_at = timezone.localtime(created_at)
    return created_at.strftime('%d/%m/%Y')
