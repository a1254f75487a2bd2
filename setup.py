# -*- coding: utf-8 -*-

from setuptools import setup

# So we get all the meta-information in one place but we call exec
# to get it. Note that we can't "from ndnkeychain._metadata import *"
# here because that won't work when setup is being run by pip
# (outside of Git checkout etc)
with open('ndnkeychain/_metadata.py') as f:
    exec(
        compile(f.read(), '_metadata.py', 'exec'),
        globals(),
        locals(),
    )

description = '''
    NDN identity, key and certificate management
'''

setup(
    name='ndnkeychain',
    version=__version__,
    description=description,
    long_description=open('README.rst', 'r').read(),
    keywords=['python', 'ndn', 'cryptography', 'certificates'],
    install_requires=open('requirements.txt').readlines(),
    # "pip install -e .[dev]" will install development requirements
    extras_require=dict(
        dev=open('dev-requirements.txt').readlines(),
    ),
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
        'Topic :: Security :: Cryptography',
        'Programming Language :: Python :: 3',
    ],
    author=__author__,
    author_email=__contact__,
    url=__url__,
    license=__license__,
    packages=["ndnkeychain"],
)
