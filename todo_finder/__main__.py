from todo_finder.cli import app

if __name__ == "__main__":
    app(prog_name="todo-finder")
