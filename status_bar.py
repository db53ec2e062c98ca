import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, grid_title, total_rows,
                  cursor_row, selected_index
    """
    text = ""
    now = time.time()
    if context.get('status_msg') and now < context.get('status_until', 0):
        text = f" {context['status_msg']}"
    else:
        title = context.get('grid_title', '')
        total_rows = context.get('total_rows', 0)
        cursor_row = context.get('cursor_row', 0)
        selected = context.get('selected_index', -1)
        sel_info = f"selected {selected}" if selected is not None and selected >= 0 else "no selection"
        row_info = f"row {cursor_row}/{max(0, total_rows - 1)}" if total_rows else "empty"
        text = f" {title} | {row_info} | {sel_info} | ? help"

    return text.ljust(width)[:width]
