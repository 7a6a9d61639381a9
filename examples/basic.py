#!/usr/bin/env python3
"""
Login form example - compiles a small description and prints the tree.
"""

from flurry_ui import configure_logging, dump_tree, ui


def submit(*args):
    print("Submit clicked!")


def main():
    configure_logging()

    ui_tree = ui(
        """
        column(padding = 16, gap = 8) {
            text("Login")
            button(on_click = submit) {
                text("Sign In")
            }
        }
        """,
        submit=submit,
    )

    print(dump_tree(ui_tree, indent=2))

    # Dispatch the click the way a renderer would
    button = ui_tree.children[1].element
    button.on_click()


if __name__ == "__main__":
    main()
