"""Setup sqidlib."""

import os
import re

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.rst')) as f:
    README = f.read()
with open(os.path.join(here, 'CHANGES.rst')) as f:
    CHANGES = f.read()
with open(os.path.join(here, 'src', 'sqidlib', '_version.py')) as f:
    versionfile = f.read()

mo = re.search(r"^__version__\s*=\s*['\"]([^'\"]*)['\"]", versionfile, re.M)
if mo:
    version = mo.group(1)
else:
    raise RuntimeError("Unable to find version string in src/sqidlib/_version.py.")

requires = [
    'Flask>=2.2',
    'SQLAlchemy>=2.0',
    'werkzeug>=2.2',
]

extras = {
    'yaml': ['PyYAML'],
    'toml': ['tomli; python_version < "3.11"'],
    'test': [
        'Flask-SQLAlchemy>=3.0',
        'PyYAML',
        'pytest',
        'tomli; python_version < "3.11"',
    ],
}

setup(
    name='sqidlib',
    version=version,
    description='Short unique ids from numbers, with Flask and SQLAlchemy support',
    long_description=README + '\n\n' + CHANGES,
    long_description_content_type='text/x-rst',
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Framework :: Flask',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Development Status :: 3 - Alpha',
        'Topic :: Software Development :: Libraries',
    ],
    keywords='sqids hashids short ids',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.9',
    install_requires=requires,
    extras_require=extras,
)
