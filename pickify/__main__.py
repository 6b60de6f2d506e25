from pickify.cli import run

run()
