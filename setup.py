from setuptools import setup, find_packages

setup(
    name="collocationscorer",
    version="0.1.0",
    description="Blaheta-Johnson collocation scoring for tokenized corpora",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "benchmark", "examples"]),
    python_requires=">=3.8",
    install_requires=["numpy>=1.21"],
    extras_require={
        "dev": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Topic :: Text Processing :: Linguistic",
    ],
)
