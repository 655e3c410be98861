import argparse
import logging
import sys
import time

import critpng


def main(args):
	before = time.perf_counter()
	try:
		img = critpng.read_png(args.input)
	except critpng.DecodeError as e:
		print(f"[!] Failed to decode {args.input!r}: {type(e).__name__}: {e}")
		return 1
	except OSError as e:
		print(f"[!] Could not open {args.input!r}: {e}")
		return 1
	after = time.perf_counter()

	print(f"[+] size={img.width}x{img.height} mode={img.pixel_type.mode}")
	print(f"[+] Decoding PNG took {after - before:.3f}s")

	if args.output is None and not args.show:
		return 0

	image = img.to_pil()
	if args.output is not None:
		image.save(args.output)
		print(f"[+] Saved to {args.output!r}")
	if args.show:
		image.show(title=f"{args.input} ({after - before:.3f}s)")
	return 0


def cli(argv=None):
	parser = argparse.ArgumentParser(description="Decode a baseline truecolour PNG")
	parser.add_argument("input", help="Input file name")
	parser.add_argument("output", nargs="?", help="Output file name (any format Pillow can write)")
	parser.add_argument("--show", action="store_true", help="Display the decoded image")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log chunk-level details")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="[%(levelname)s] %(name)s: %(message)s",
	)
	return main(args)


if __name__ == "__main__":
	sys.exit(cli())
