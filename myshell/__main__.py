from myshell.main import run

run()
