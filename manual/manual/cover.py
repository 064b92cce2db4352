# Cover page of the manual.

pdf.move_down(200)
pdf.text("Example manual", size=40, style="bold")
pdf.move_down(10)
pdf.stroke_horizontal_rule()
pdf.move_down(20)
pdf.text(
    "Every page after this one shows a short piece of code and, right below"
    " it, what that code draws.",
    size=14,
)
