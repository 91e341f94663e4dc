#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
General-purpose sliding-window lossless compression
Command line front end for the LZ77 coder

This code is licensed according to the MIT license as follows:
----------------------------------------------------------------------------
Copyright (c) 2026 The lz77-compression authors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
----------------------------------------------------------------------------
"""

import argparse
import sys

import lz77


EPILOG = """examples:
  %(prog)s -s "hello world" -o out.lz77
  %(prog)s -i input.txt -o compressed.lz77
  %(prog)s -d -i compressed.lz77 -o output.txt
"""


class ArgumentParser(argparse.ArgumentParser):
    # Usage errors exit with 1, like engine errors
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, "Error: {0}\n".format(message))


def make_parser():
    parser = ArgumentParser(prog='lz77',
                            description="Greedy LZ77 compressor/decompressor",
                            epilog=EPILOG,
                            formatter_class=argparse.RawDescriptionHelpFormatter)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('-c', dest='decompress', action='store_false',
                      help="compress (default)")
    mode.add_argument('-d', dest='decompress', action='store_true',
                      help="decompress")
    parser.set_defaults(decompress=False)
    parser.add_argument('-i', dest='input_file', metavar='FILE',
                        help="read input from FILE")
    parser.add_argument('-s', dest='input_string', metavar='STRING',
                        help="use STRING as input")
    parser.add_argument('-o', dest='output_file', metavar='FILE',
                        help="write output to FILE (default: stdout)")
    parser.add_argument('-w', dest='window_size', type=int, default=lz77.WINDOW_SIZE, metavar='N',
                        help="window size when compressing (default: %(default)s)")
    parser.add_argument('-m', dest='max_match', type=int, default=lz77.MAX_MATCH_LEN, metavar='N',
                        help="maximum match length when compressing (default: %(default)s)")
    parser.add_argument('-v', dest='verbose', action='store_true',
                        help="print the compressed size to stderr")
    return parser


def read_input(args):
    if args.input_file is not None:
        with open(args.input_file, "rb") as in_stream:
            return in_stream.read()
    return args.input_string.encode('utf-8')


def write_output(args, out_data):
    if args.output_file is not None:
        with open(args.output_file, "wb") as out_stream:
            out_stream.write(out_data)
    else:
        sys.stdout.buffer.write(out_data)
        sys.stdout.buffer.flush()


def run(args):
    in_data = read_input(args)
    if args.decompress:
        out_data = lz77.decompress(in_data)
        compressed, original = in_data, out_data
    else:
        config = lz77.configure(window_size=args.window_size, max_match=args.max_match)
        out_data = lz77.compress(in_data, config)
        compressed, original = out_data, in_data
    write_output(args, out_data)

    if args.verbose:
        print("length of encoded data = {0}".format(len(compressed)), file=sys.stderr)
        print("(length = {0})".format(len(original)), file=sys.stderr)
        if original:
            print("Compressed size is {0:0.0f}%".format(float(len(compressed))/len(original)*100), file=sys.stderr)


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    if args.input_file is not None and args.input_string is not None:
        print("Error: cannot use both -i and -s", file=sys.stderr)
        return 1
    if args.input_file is None and args.input_string is None:
        print("Error: must specify -i or -s", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        run(args)
    except lz77.OutOfMemoryError:
        print("Error: Out of memory", file=sys.stderr)
        return 1
    except lz77.InvalidDataError as e:
        print("Error: Invalid compressed data: {0}".format(e), file=sys.stderr)
        return 1
    except lz77.InvalidArgumentError as e:
        print("Error: {0}".format(e), file=sys.stderr)
        return 1
    except OSError as e:
        print("Error: {0}".format(e), file=sys.stderr)
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(main())
