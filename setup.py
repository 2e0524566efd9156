import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="nbtstruct",
    version="0.1.0",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Named Binary Tag files for humans",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests"]),
    install_requires=[
        'bitstring',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPLv2 License",
        "Operating System :: OS Independent",
    ],
)
