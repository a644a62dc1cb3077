import setuptools
import sys
import os
import re


if sys.version_info < (3, 7):
    sys.exit('Sorry, Python < 3.7 is not supported')

with open("README.md", "r") as fh:
    long_description = fh.read()

# Read metadata from metadata file
metadata_file = open(os.path.join(os.path.dirname(__file__), 'opensearch_ml', '_metadata.py')).read()
metadata = dict(re.findall("__([a-z]+)__ = '([^']+)'", metadata_file))


def read_requirements(fi: str):
    def proc_req(r):
        r = r.strip()
        if len(r) == 0 or any(map(lambda x: r.startswith(x), ["#", ".", "-"])):
            return None
        return r

    with open(fi, "rt") as rt:
        lines = rt.read().splitlines()
    return list(filter(None, map(proc_req, lines)))


requires = read_requirements("requirements.txt")
test_requires = read_requirements("requirements-test.txt")

setuptools.setup(
    name="opensearch-ml",
    version=metadata['version'],
    description="Converge OpenSearch ML Commons model groups, connectors and models from declarations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    install_requires=requires,
    extras_require={"test": test_requires},
    entry_points={"console_scripts": ["osml=cli.osml:osml"]},
    python_requires=">=3.7",
)
