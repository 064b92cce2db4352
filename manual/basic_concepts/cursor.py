# The cursor is the vertical position where the next flowing text starts. It
# moves down as text is added, and <b>move_down</b>, <b>move_up</b> and
# <b>move_cursor_to</b> move it explicitly.

pdf.text(f"The cursor is at {pdf.cursor:.0f}")
pdf.text(f"And now it is at {pdf.cursor:.0f}")
pdf.move_down(40)
pdf.text(f"After moving down 40 it is at {pdf.cursor:.0f}")
pdf.move_cursor_to(50)
pdf.text(f"Moved to {pdf.cursor:.0f}, near the bottom of the page")
