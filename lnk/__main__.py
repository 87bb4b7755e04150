from lnk.cli import main

main(prog_name="lnk")
