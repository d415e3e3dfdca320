from a2h.tool import run

run()
